"""podlink - podnet:// deep links for the multi-screen client."""
