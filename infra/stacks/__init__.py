"""
Claims API Infrastructure
=========================
CDK stacks for the Claims API.

Stacks:
- ClaimsApiStack: DynamoDB claims table, S3 notes bucket, API Lambda and REST API
"""

from .claims_api_stack import ClaimsApiStack

__all__ = [
    "ClaimsApiStack",
]
