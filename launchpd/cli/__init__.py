"""Command line interface for launchpd"""
