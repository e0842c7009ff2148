"""Clinic application for the MediBook backend.

This package contains models, serializers, services, views and route
registrations for accounts, appointments, medical records and
messaging.
"""
