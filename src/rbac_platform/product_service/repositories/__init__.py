# Package marker; repositories are imported directly from submodules.
