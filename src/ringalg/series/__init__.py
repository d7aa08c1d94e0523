"""Packaged Taylor series. Each module tags its series with the registry decorators."""
