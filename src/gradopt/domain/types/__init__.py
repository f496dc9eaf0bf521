from ._vector import VectorLike
