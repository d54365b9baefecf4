"""
Test suite for financial report sentiment scoring.
Contains tests for document segmentation, corpus handling, vectorization,
model training and the end-to-end pipeline.
"""
