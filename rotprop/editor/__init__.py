"""Qt editor integration for rotprop properties."""
