"""
Orders Module
=============

Public order intake.

Provides:
- POST /order: validate a submission and forward it to the store as a
  ``create`` action
- Order field rules shared with the admin routes and the client
"""

from flask import Blueprint

orders_bp = Blueprint('orders', __name__)

from . import routes

__all__ = ['orders_bp']
