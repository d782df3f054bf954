"""Tests for the Housework Queue integration."""
