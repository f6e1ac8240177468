"""Evidence Manager - HTTP API"""
