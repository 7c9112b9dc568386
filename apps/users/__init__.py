"""Users app package.

Holds the ``Account`` identities that bookings are attributed to, the
``Principal`` value the authentication layer passes in, and the
returning-guest discount eligibility tracker.
"""
