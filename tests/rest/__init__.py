"""Tests for restdns.rest.*"""
