"""
A setuptools based setup module.

See:
https://packaging.python.org/guides/distributing-packages-using-setuptools/
"""

import setuptools

INSTALL_REQUIRES = [
    "attrs>=22.2",
    "numpy",
    "scipy",
    "sympy>=1.9",
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest",
    ],
}


def long_description():
    """Parse long description from readme."""
    with open("README.md", "r") as readme_file:
        return readme_file.read()


setuptools.setup(
    name="photoamp",
    version="0.1.0",
    author="photoamp developers",
    description=(
        "Helicity amplitudes, K-matrix unitarization and triple-Regge"
        " inclusive cross-sections for hadron photoproduction"
    ),
    long_description=long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages("src"),
    license="GPLv3 or later",
    python_requires=">=3.8",
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
)
