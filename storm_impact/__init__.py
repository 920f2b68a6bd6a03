"""
storm_impact package
====================

Cleans the NOAA Storm Data table and ranks event types by human and economic
impact.

- Event-type taxonomy and match rules are in `storm_impact/taxonomy.py`.
- Damage decoding is in `storm_impact/damage.py`.
- The cleaning pipeline is in `storm_impact/pipeline.py`.
- The CLI entry point is in `storm_impact/cli.py`.
"""

__version__ = '0.1.0'
