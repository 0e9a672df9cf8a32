"""NeverBeen: random destinations within a radius of an origin."""

__version__ = "0.1.0"
