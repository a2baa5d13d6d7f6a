"""git-flow branching model as a git extension."""
