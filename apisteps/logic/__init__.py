"""Stateful building blocks used by `apisteps.state.State`.

Nothing here knows about step phrases or the feature-file runner.
"""
