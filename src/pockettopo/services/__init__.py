"""Service layer — file-level operations over the decoder.

INVARIANT: Every public service method returns a ServiceResult; decode
failures never escape as exceptions.
"""
