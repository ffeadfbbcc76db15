"""
Support library for the regtest functional tests.
"""
