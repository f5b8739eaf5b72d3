"""
Genealogy Census - Transcribe family-tree records onto historical census forms.

This package describes the column layouts of historical census returns and
evaluates each column against the people of a household, using records held
in memory or in a SQLite family-tree database.
"""

__version__ = "0.1.0"
__author__ = "Genealogy Census Contributors"
