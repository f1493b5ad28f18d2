"""Release tooling for multi-module Go repositories: versioning file, tags, sync, prerelease."""
