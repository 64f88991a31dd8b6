[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rghychat"
version = "0.1.0"
description = "Chat application core: users, stories, chat rooms, groups, message status, privacy and prefix search"
requires-python = ">=3.10"
keywords = ["chat", "messaging", "groups", "stories", "trie", "autocomplete", "bcrypt"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Communications :: Chat",
]
dependencies = [
    "bcrypt",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rghychat-search-demo = "rghychat.search:main"

[tool.hatch.build.targets.wheel]
packages = ["rghychat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
