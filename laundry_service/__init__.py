"""
Laundry Service - campus laundry ordering and batch tracking
"""
__version__ = "1.0.0"
