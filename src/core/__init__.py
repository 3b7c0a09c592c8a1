#!/usr/bin/env python3
"""
Core services for the performance demo: configuration, telemetry
collection, formatting and environment orchestration.
"""
