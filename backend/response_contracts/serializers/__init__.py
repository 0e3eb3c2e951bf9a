"""
Response serializers and envelope helpers.
"""

from .response import small_body, paginated_body, error_envelope, content_disposition, header_value

__all__ = ['small_body', 'paginated_body', 'error_envelope', 'content_disposition', 'header_value']
