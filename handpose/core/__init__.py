"""Shared configuration, errors and helpers"""
