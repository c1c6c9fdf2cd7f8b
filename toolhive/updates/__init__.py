"""Checks for newer releases against the update service."""