"""
Model training and evaluation for the financial report sentiment project.
This package fits, evaluates and persists sentiment models.
"""

from .model_trainer import (
    CLASSIFICATION,
    REGRESSION,
    SentimentModel,
    SentimentPipeline,
    fit,
    predict,
    evaluate,
    evaluate_detailed,
    save_model,
    load_model
)

__all__ = [
    'CLASSIFICATION',
    'REGRESSION',
    'SentimentModel',
    'SentimentPipeline',
    'fit',
    'predict',
    'evaluate',
    'evaluate_detailed',
    'save_model',
    'load_model',
]
