# ==============================================
# report_engine/transformers/__init__.py
# ==============================================
from .base_transformer import BaseTransformer
from .conditions import Condition
from .field_resolver import resolve, resolve_first, to_mapping
from .row_normalizer import RowNormalizer, SourceSpec
from . import metric_calculator

# Transformer registry
TRANSFORMER_REGISTRY = {
    'normalizer': RowNormalizer,
    'row_normalizer': RowNormalizer,
    'normalize': RowNormalizer,
}


def get_transformer(transformer_type: str, **kwargs):
    """
    Factory function to get appropriate transformer based on type

    Args:
        transformer_type: Type of transformer to create
        **kwargs: Additional arguments to pass to transformer

    Returns:
        Transformer instance

    Raises:
        ValueError: If transformer type is not supported
    """
    transformer_class = TRANSFORMER_REGISTRY.get(transformer_type.lower())

    if not transformer_class:
        supported_types = list(TRANSFORMER_REGISTRY.keys())
        raise ValueError(
            f"Unsupported transformer type: {transformer_type}. "
            f"Supported types: {supported_types}"
        )

    return transformer_class(**kwargs)


__all__ = [
    'BaseTransformer',
    'Condition',
    'RowNormalizer',
    'SourceSpec',
    'metric_calculator',
    'resolve',
    'resolve_first',
    'to_mapping',
    'TRANSFORMER_REGISTRY',
    'get_transformer',
]
