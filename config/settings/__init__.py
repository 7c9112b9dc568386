"""Settings package for Shangarh Stays.

`base.py` contains configuration shared across environments. The
`dev.py`, `prod.py` and `test.py` modules extend it with environment
specific overrides.
"""
