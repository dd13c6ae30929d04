"""
Quantity takeoff and stock-cut estimating.

Given a trade and its form fields, derive physical quantities, pick the
cheapest stock lengths, price every line and total the estimate.
"""
