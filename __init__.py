"""
Quantile cut-point binning

Finds cut points for a single continuous feature so that a histogram-based
learner can work on a handful of integer bins: long runs of equal values are
kept whole, the ranges between them share a fixed cut budget, and ties in
that sharing are broken by a seeded random stream so results are reproducible.

``generate_quantile_cut_points`` finds the cut points and ``discretize`` maps
values to bin ids; ``binning.build_bins``/``binning.apply_bins`` do both for
every column of a feature matrix.
"""
