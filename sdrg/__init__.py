"""
sd-rg: sd-style find and replace, delegating all matching to ripgrep
"""
__version__ = "0.1.0"
