"""Namespace for proxy code; it holds no modules at present."""