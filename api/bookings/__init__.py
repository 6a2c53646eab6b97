"""
Bookings: timed entries with an optional end and a free-text description.
"""
