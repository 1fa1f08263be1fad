"""Gamification: XP/levels, streaks, badges and the session-scoped store."""
