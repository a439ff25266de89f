"""
The CONTROLLER layer exposes the load boundary: it runs the model pipeline and
reports failures as values instead of exceptions.
"""
