"""Numerical transforms: chirp-z and randomized linear algebra."""
