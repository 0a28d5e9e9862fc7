"""
Infrastructure layer: timer services, configuration files and logging output.
"""
