"""Run IntelliJ code inspections from the command line and summarize the results."""

__version__ = "1.0.0"
