"""Test suite for the RFI tracker."""
