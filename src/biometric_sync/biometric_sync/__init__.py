"""Biometric Sync package.

Pulls punch logs written by biometric terminals into an external table and
reconciles them into daily attendance records. Organized by feature modules
(employees, attendance, device_logs, sync) with a thin Flask controller layer
over service/repository layers.
"""
