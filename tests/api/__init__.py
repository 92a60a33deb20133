"""Tests for restdns.api.*"""
