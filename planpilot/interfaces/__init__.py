"""Interfaces 层"""
