"""Structured records of engine evaluations."""

from .jsonl import append_evaluation, append_jsonl

__all__ = ["append_evaluation", "append_jsonl"]
