"""Release and pull request build cache."""
