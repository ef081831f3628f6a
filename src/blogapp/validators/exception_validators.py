"""Checks run on repository input before it reaches the database."""

from sqlalchemy import inspect as sa_inspect


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """Keys of `kwargs` that are not mapped attributes of `model`, sorted."""
    known = set(sa_inspect(model).attrs.keys())
    return sorted(set(kwargs) - known)


def get_required_columns(model) -> list[str]:
    """
    Attribute names the caller must supply: NOT NULL columns without a client
    or server default (so `id` and `created_at` of a post are not required).
    """
    return [
        attr.key
        for attr in sa_inspect(model).column_attrs
        for col in attr.columns[:1]
        if not col.nullable and col.default is None and col.server_default is None
        and not (col.primary_key and col.autoincrement is True)
    ]
