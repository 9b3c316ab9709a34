"""dirkeeper - configuration-driven directory maintenance.

Lists, measures, cleans, and archives directories described in a
configuration file.
"""

__version__ = "0.3.0"
