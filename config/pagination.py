"""
Page/limit pagination shared by every listing endpoint.

``page`` is 1-based, ``limit`` is capped per endpoint, and the response
carries a ``pagination`` block next to ``results``. Pages past the end
return an empty ``results`` list instead of a 404.
"""

import math
from collections import OrderedDict

from rest_framework.exceptions import ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


def build_pagination(*, total: int, page: int, limit: int) -> dict:
    """
    Compute the pagination block for a listing.

    Args:
        total: Total number of items matching the query
        page: Requested 1-based page
        limit: Page size

    Returns:
        Dictionary with current_page, total_pages, total_items,
        has_next and has_prev
    """
    total_pages = math.ceil(total / limit) if limit else 0
    return OrderedDict([
        ('current_page', page),
        ('total_pages', total_pages),
        ('total_items', total),
        ('has_next', page < total_pages),
        ('has_prev', page > 1),
    ])


def parse_page(value) -> int:
    """Parse the ``page`` query param; missing means 1, anything below 1 is invalid."""
    if value in (None, ''):
        return 1
    try:
        page = int(value)
    except (TypeError, ValueError):
        raise ValidationError({'page': ['Page must be a positive integer']})
    if page < 1:
        raise ValidationError({'page': ['Page must be a positive integer']})
    return page


class SkipLimitPagination(PageNumberPagination):
    """Skip/limit pagination: ``offset = (page - 1) * limit``."""

    page_size = 10
    page_query_param = 'page'
    page_size_query_param = 'limit'
    max_page_size = 50

    def paginate_queryset(self, queryset, request, view=None):
        self.request = request
        self.page_number = parse_page(request.query_params.get(self.page_query_param))
        self.limit = self.get_page_size(request)
        self.total = queryset.count()

        offset = (self.page_number - 1) * self.limit
        return list(queryset[offset:offset + self.limit])

    def get_pagination(self) -> dict:
        return build_pagination(total=self.total, page=self.page_number, limit=self.limit)

    def get_paginated_response(self, data):
        return Response(OrderedDict([
            ('results', data),
            ('pagination', self.get_pagination()),
        ]))

    def get_paginated_response_schema(self, schema):
        return {
            'type': 'object',
            'required': ['results', 'pagination'],
            'properties': {
                'results': schema,
                'pagination': {
                    'type': 'object',
                    'properties': {
                        'current_page': {'type': 'integer', 'example': 1},
                        'total_pages': {'type': 'integer', 'example': 3},
                        'total_items': {'type': 'integer', 'example': 25},
                        'has_next': {'type': 'boolean'},
                        'has_prev': {'type': 'boolean'},
                    },
                },
            },
        }

    def get_schema_operation_parameters(self, view):
        return [
            {
                'name': self.page_query_param,
                'required': False,
                'in': 'query',
                'description': 'Page number (1-based).',
                'schema': {'type': 'integer', 'minimum': 1},
            },
            {
                'name': self.page_size_query_param,
                'required': False,
                'in': 'query',
                'description': f'Items per page (max {self.max_page_size}).',
                'schema': {'type': 'integer', 'minimum': 1},
            },
        ]
