"""
barberslots - appointment slot availability for barbershops and salons.
"""

__version__ = "0.1.0"
