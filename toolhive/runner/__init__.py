"""Namespace for runner code; it holds no modules at present."""