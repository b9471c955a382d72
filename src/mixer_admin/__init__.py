"""
Mixer Admin: a Reflex back-office for a concrete-mixer rental business.

This package provides the admin dashboard for customers, quotations,
service records, machines, terms & conditions and company settings, all
backed by the business's REST API.

Subpackages:
- services: REST resource clients, error taxonomy and the demo backend
- query: Cached list fetching, optimistic mutations and debouncing
- listing: List-page store, pagination, dialogs, stats and controller
- components: Reflex UI components
- models: Pagination envelope and status enums
- data: Static demo fixtures

Main entry points:
- app.main(): Start the development server
- app.app: The Reflex application instance
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
