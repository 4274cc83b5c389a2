#!/usr/bin/env python3
"""
Example: Basic usage of Silhouette as a Python library
"""

import json

import numpy as np

from silhouette import diff_shapes, get_shape

# Shape a model response without dumping its buffers
response = {
    "embeddings": np.zeros((32, 768), dtype=np.float32),
    "tokens": ["the", "cat", "sat"],
    "scores": [0.1] * 500,
    "meta": {"model": "encoder-base", "created": None},
}
shape = get_shape(response)
print(json.dumps(shape, indent=2))

# Compare against a later response
later = dict(response, meta={"model": "encoder-base", "created": "2024-05-01"})
for change in diff_shapes(shape, get_shape(later)).changes:
    print(f"{change.location}: {change.old} -> {change.new}")
