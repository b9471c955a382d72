"""
Static and demo data for the Mixer Admin dashboard.

This package contains fixture data used by DemoBackend for development,
testing, and demonstrations without a running REST API.

Modules:
- demo_records: Customers, machines, quotations, service records, terms
  and the company profile
"""
