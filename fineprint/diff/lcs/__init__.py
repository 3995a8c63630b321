"""Longest-common-subsequence computation over pairs of sequences."""