"""Oversold screener: technical indicator, signal and composite score engine."""
