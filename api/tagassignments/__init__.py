"""
Tag assignments: the (booking, tag) pairs linking bookings to tags.
"""
