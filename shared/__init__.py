"""
Shared components used across pipeline phases
"""
