"""TeamCity project definitions for the Azure Stack provider acceptance tests."""
