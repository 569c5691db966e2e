# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
lincast: syntax front-end for an affine calculus with quantified types,
equivalence witnesses and casts.
"""
