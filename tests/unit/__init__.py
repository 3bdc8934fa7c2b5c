"""
Unit tests for resilient_fetch.

Test individual components in isolation:
- Retryability classifier and attempt bookkeeping
- Bounded and network-failure schedulers (fake transports)
- Plain and progress transports (httpx.MockTransport)
- Speed estimator
- Request ledgers
- Orchestrator end to end
"""
