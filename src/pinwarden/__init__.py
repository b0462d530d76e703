"""Pin request relay bot: members ask, moderators approve or deny."""

__version__ = "0.1.0"
