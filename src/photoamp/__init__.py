"""Helicity amplitudes for hadron photoproduction.

The package is organized bottom-up:

- :mod:`photoamp.kinematics` contains the Lorentz tensor and Dirac algebra that
  helicity amplitudes are assembled from, as well as the two-body reaction
  kinematics that all amplitudes refer to.
- :mod:`photoamp.dynamics` provides phase-space and loop functions.
- :mod:`photoamp.amplitude` defines the `.Amplitude` interface and concrete models,
  including the coupled-channel `.TwoChannelKMatrix`.
- :mod:`photoamp.inclusive` turns an exclusive amplitude into triple-Regge
  inclusive cross-sections.
"""
