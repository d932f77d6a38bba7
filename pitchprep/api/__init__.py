"""
HTTP surface for the pitch pipeline.
"""
