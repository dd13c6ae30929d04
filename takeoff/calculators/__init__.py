"""
Per-trade takeoff strategies.

Pure Python math. Each trade module declares its form FIELDS, the catalog
MATERIALS it prices, and a derive(fields, ctx) function that turns cleaned
fields into line items.
"""
