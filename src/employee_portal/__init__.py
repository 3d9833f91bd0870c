"""Employee Portal package.

Feature modules (users, attendance, sales, products, reports, dashboard) each
carry a repository interface with MySQL and in-memory implementations, a
service layer, and a thin Flask controller.
"""
