"""
glycodesial - Computational desialylation of glycoprotein mass spectra.

Strips sialic-acid and acetyl mass contributions from an annotated
sialylated peak list and reconciles the result against an experimentally
desialylated reference spectrum.
"""

__version__ = "0.1.0"
