"""Analytics app package: admin reports over bookings and rooms."""
