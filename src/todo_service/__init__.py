"""
Todo resource service package.

Exposes the FastAPI application factory from :mod:`todo_service.main`; the
package itself has no import-time side effects.
"""

__version__ = "0.1.0"
