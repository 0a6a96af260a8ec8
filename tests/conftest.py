import logging

import pytest

from photoamp.constants import M_B1, M_JPSI, M_PROTON
from photoamp.kinematics.reaction import ReactionKinematics

logging.getLogger().setLevel(level=logging.ERROR)


@pytest.fixture()
def b1_kinematics() -> ReactionKinematics:
    """Photoproduction of an axial vector, as in :math:`\\gamma p \\to b_1 p`."""
    kinematics = ReactionKinematics(M_B1, name="b1")
    kinematics.set_meson_jp(1, +1)
    return kinematics


@pytest.fixture()
def jpsi_kinematics() -> ReactionKinematics:
    kinematics = ReactionKinematics(M_JPSI, M_PROTON, name="jpsi")
    kinematics.set_meson_jp(1, -1)
    return kinematics


@pytest.fixture()
def pseudoscalar_kinematics() -> ReactionKinematics:
    return ReactionKinematics(1.0, M_PROTON, name="eta")
