"""schemaguard - flag rollout-breaking changes in database changelogs."""

__version__ = "0.1.0"
