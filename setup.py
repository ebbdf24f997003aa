"""
Build script for the ctc_beam package.

=============================================================================
USAGE
=============================================================================

From the project root:
    pip install -e .

With test dependencies:
    pip install -e ".[test]"

After installation:
    from ctc_beam import CTCBeamSearch, EN_VOCABULARY
    decoder = CTCBeamSearch(EN_VOCABULARY)
    beams = decoder.search(log_probs, width=10)

=============================================================================
TESTS
=============================================================================

    pytest tests/
"""

from setuptools import setup, find_packages


setup(
    name="ctc-beam-search",
    version="0.1.0",
    description="CTC prefix beam search decoder for speech and OCR models",
    packages=find_packages(include=["ctc_beam", "ctc_beam.*"]),
    python_requires=">=3.9",
    install_requires=[
        "torch>=2.0.0",
        "numpy",
        "pyyaml",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
    ],
)
