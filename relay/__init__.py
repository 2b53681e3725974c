"""Proxy relay service: forwards requests through a rotating pool of upstream proxies."""
