"""nl-payroll - Dutch payroll gross-to-net calculation engine."""

__version__ = "0.1.0"
