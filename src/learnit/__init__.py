"""LearnIT client core: API client, gamification store and notifications."""

__version__ = "0.1.0"
