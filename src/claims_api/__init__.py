"""
Claims API
==========
Lambda service exposing claim lookup, creation and AI summarization.

Modules:
- config: Settings resolved once from the environment
- models: Claim / ClaimSummary records and create-payload validation
- storage: DynamoDB claim store and S3 notes store (plus mock fixtures)
- genai: Bedrock summarizer (plus deterministic mock)
- service: ClaimsService use cases and adapter wiring
- api: API Gateway handler
"""
