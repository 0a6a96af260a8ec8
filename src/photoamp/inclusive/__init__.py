"""Semi-inclusive cross-sections from exclusive amplitudes."""
