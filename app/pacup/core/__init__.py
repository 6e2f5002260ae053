"""Core upgrade resolution logic for pacup.

This package holds the candidate builder, the registry correlator, the
devel tracker, the source aggregator and the selection mini-language.
"""
