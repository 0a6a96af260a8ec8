"""Exclusive helicity amplitudes.

Every model derives from `.Amplitude` in :mod:`.core`. Concrete models are the
partial waves in :mod:`.partial_wave`, the meson exchange in :mod:`.exchange` and
the baryon resonance in :mod:`.resonance`. Models can be superposed with
`.AmplitudeSum`.
"""
