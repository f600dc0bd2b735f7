"""Model actions and the Model protocol."""

from .base import Model, ModelAction, ModelFn, ModelInfo, define_model

__all__ = ["Model", "ModelAction", "ModelFn", "ModelInfo", "define_model"]
