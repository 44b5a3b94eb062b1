"""Utility modules for launchpd"""
