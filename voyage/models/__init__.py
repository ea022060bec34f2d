"""
Pydantic models for request/response validation
"""
from voyage.models.memory import *
