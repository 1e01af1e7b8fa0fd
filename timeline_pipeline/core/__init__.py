"""
Core services of the channel timeline pipeline
"""
