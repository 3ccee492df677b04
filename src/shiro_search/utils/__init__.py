"""Small text helpers shared by the domain and search layers."""
