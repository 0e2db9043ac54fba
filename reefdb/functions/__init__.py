"""Namespace set aside for SQL functions; it holds no modules yet."""