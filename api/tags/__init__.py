"""
Tags: named labels that can be assigned to bookings.
"""
