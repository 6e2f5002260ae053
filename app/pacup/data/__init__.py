"""Bundled data files for pacup."""
