"""Lorentz and Dirac algebra, plus the kinematics of two-body photoproduction.

- :mod:`.lorentz`: metric signs and contraction of `.LorentzTensor` objects.
- :mod:`.spinor`: Dirac matrices and spinors as tensor elements.
- :mod:`.reaction`: centre-of-mass kinematics provider `.ReactionKinematics`.
"""
