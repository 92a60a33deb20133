"""Tests for restdns.rest.api.*"""
