"""Chat application data layer: users, stories, chat rooms, groups, message status, privacy and prefix search."""

__version__ = "0.1.0"