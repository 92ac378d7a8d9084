"""
Unit tests for the Moderation Aggregator.

Test individual components in isolation:
- Validator (acceptance rules, length in UTF-16 code units)
- Threshold evaluation
- Provider adapters (request shape, normalization, error translation, retry)
- Aggregator (OR verdict, fail-open / fail-closed policy)
- Formatter and service
- Configuration and dependency injection
"""
