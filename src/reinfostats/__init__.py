"""Condominium price statistics from the MLIT reinfolib API."""
