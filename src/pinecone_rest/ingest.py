import json
from typing import Union, List, Dict, Any, Mapping

import numpy as np
import pandas as pd
import pyarrow as pa

from .models import Vector

RESERVED = ("id", "values", "sparse_values", "metadata")


def _row_to_vector(row: Mapping[str, Any]) -> Vector:
    if "id" not in row:
        raise ValueError(f"Record has no 'id': {row!r}")
    if "values" not in row:
        raise ValueError(f"Record {row['id']!r} has no 'values'")

    values = row["values"]
    if isinstance(values, str):
        # JSON-encoded list, e.g. read back from CSV
        values = json.loads(values)

    metadata = row.get("metadata")
    if _is_missing(metadata):
        metadata = {}
    elif isinstance(metadata, str):
        metadata = json.loads(metadata)
    metadata = {k: _plain(v) for k, v in dict(metadata).items()}
    for key, val in row.items():
        if key in RESERVED or _is_missing(val):
            continue
        metadata[key] = _plain(val)

    sparse = row.get("sparse_values")
    return Vector(
        id=str(row["id"]),
        values=np.asarray(values, dtype=np.float64),
        sparse_values=None if _is_missing(sparse) else sparse,
        metadata=metadata or None,
    )


def _plain(val: Any) -> Any:
    # numpy scalars and arrays (list columns from Arrow) into JSON-ready Python values
    if isinstance(val, np.ndarray):
        return val.tolist()
    if isinstance(val, np.generic):
        return val.item()
    return val


def _is_missing(val: Any) -> bool:
    if val is None:
        return True
    if val is pd.NA or val is pd.NaT:
        return True
    if isinstance(val, float) and np.isnan(val):
        return True
    return False


def to_vectors(
    data: Union[List[Dict[str, Any]], pd.DataFrame, pa.Table, Mapping[str, Any]]
) -> List[Vector]:
    """
    Converts various input formats to Vector records ready for upsert.

    Args:
        data: Input data. One of:
            - List of dicts with 'id' and 'values' keys.
            - Pandas DataFrame with 'id' and 'values' columns.
            - PyArrow Table with the same columns.
            - Mapping of id -> values (list or numpy array).
          Optional 'sparse_values' and 'metadata' columns are passed through;
          any other column is folded into metadata.

    Returns:
        List[Vector]: Records in input order.
    """
    if isinstance(data, pa.Table):
        return to_vectors(data.to_pandas())

    if isinstance(data, pd.DataFrame):
        if "id" not in data.columns:
            raise ValueError("Data must have an 'id' column")
        if "values" not in data.columns:
            raise ValueError("Data must have a 'values' column")
        return [_row_to_vector(row) for row in data.to_dict(orient="records")]

    if isinstance(data, list):
        return [v if isinstance(v, Vector) else _row_to_vector(v) for v in data]

    if isinstance(data, Mapping):
        return [Vector(id=str(k), values=np.asarray(v, dtype=np.float64)) for k, v in data.items()]

    raise TypeError(f"Unsupported data type: {type(data)}")
