"""JSON persistence of network weights and biases.

A saved network is a single JSON document::

    {"Hidden": {"Weight": [[...], ...], "Bias": [...]},
     "Output": {"Weight": [[...], ...], "Bias": [...]}}

Activations are not stored; a loaded network starts with zeroed buffers.
"""
from __future__ import annotations

import io
import json
import logging
import math
from typing import IO, Any

from .errors import MalformedState
from .layer import Layer, Matrix, Vector
from .network import Network

logger = logging.getLogger(__name__)

LAYER_FIELDS = ("Hidden", "Output")


def _layer_record(layer: Layer) -> dict[str, Any]:
    return {"Weight": [row.copy() for row in layer.weights], "Bias": layer.bias.copy()}


def to_record(network: Network) -> dict[str, Any]:
    """Convert ``network`` into the plain dictionary that :func:`save` writes."""

    return {"Hidden": _layer_record(network.hidden), "Output": _layer_record(network.output)}


def _number(value: Any, where: str) -> float:
    # bool is an int subclass but never a valid weight
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedState(f"{where} must be a number, got {type(value).__name__}")
    try:
        number = float(value)
    except OverflowError as exc:
        raise MalformedState(f"{where} is too large for a float") from exc
    if not math.isfinite(number):
        raise MalformedState(f"{where} must be finite")
    return number


def _parse_layer(record: Any, name: str) -> Layer:
    if not isinstance(record, dict):
        raise MalformedState(f"{name} must be an object")
    if "Weight" not in record or "Bias" not in record:
        raise MalformedState(f"{name} requires both Weight and Bias")

    raw_weights = record["Weight"]
    raw_bias = record["Bias"]
    if not isinstance(raw_weights, list) or not raw_weights:
        raise MalformedState(f"{name}.Weight must be a non-empty list of rows")
    if not isinstance(raw_bias, list):
        raise MalformedState(f"{name}.Bias must be a list")

    weights: Matrix = []
    width = None
    for i, row in enumerate(raw_weights):
        if not isinstance(row, list) or not row:
            raise MalformedState(f"{name}.Weight[{i}] must be a non-empty list")
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise MalformedState(f"{name}.Weight rows have inconsistent lengths")
        weights.append([_number(value, f"{name}.Weight[{i}]") for value in row])

    if len(raw_bias) != len(weights):
        raise MalformedState(f"{name}.Bias has {len(raw_bias)} entries for {len(weights)} nodes")
    bias: Vector = [_number(value, f"{name}.Bias") for value in raw_bias]
    return Layer(weights, bias)


def from_record(record: Any) -> Network:
    """Build a network from a dictionary produced by :func:`to_record`.

    Raises
    ------
    MalformedState
        If any field is missing, has the wrong type, or the layer shapes do
        not chain together.
    """

    if not isinstance(record, dict):
        raise MalformedState("network record must be an object")
    for field in LAYER_FIELDS:
        if field not in record:
            raise MalformedState(f"network record is missing {field}")

    hidden = _parse_layer(record["Hidden"], "Hidden")
    output = _parse_layer(record["Output"], "Output")
    if output.num_inputs != hidden.num_nodes:
        raise MalformedState(
            f"Output layer expects {output.num_inputs} inputs but Hidden has {hidden.num_nodes} nodes"
        )
    return Network(hidden, output)


def save(network: Network, stream: IO) -> None:
    """Write ``network`` as one JSON document followed by a newline.

    Text streams receive the document as ``str``; any other stream receives
    it UTF-8 encoded.
    """

    text = json.dumps(to_record(network)) + "\n"
    if isinstance(stream, io.TextIOBase):
        stream.write(text)
    else:
        stream.write(text.encode("utf-8"))
    logger.debug("Saved %r", network)


def load(stream: IO) -> Network:
    """Read a network written by :func:`save` from a text or binary stream."""

    try:
        record = json.loads(stream.read())
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise MalformedState(f"network record is not valid JSON: {exc}") from exc
    network = from_record(record)
    logger.debug("Loaded %r", network)
    return network
