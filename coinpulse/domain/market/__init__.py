"""
Market bounded context: domain layer.

- Quote caching for the tracked symbol set
- Moving-average Buy/Sell/Hold signals
- Prediction accuracy roll-up
- Portfolio valuation and threshold alerts
"""
