"""HR Operations package.

Organized by feature modules (departments, employees, holidays, attendance,
meetings, payments) with a thin Flask controller layer over service and
repository layers backed by MongoDB.
"""
