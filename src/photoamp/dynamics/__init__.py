"""Analytic lineshape ingredients, currently the two-body phase space."""
