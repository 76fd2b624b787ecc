from __future__ import annotations

# dotnet build / pack
DOTNET_BUILD_TIMEOUT_SECONDS = 20 * 60.0

# dotnet nuget push (network)
DOTNET_PUSH_TIMEOUT_SECONDS = 10 * 60.0

# gh release create (network, uploads the asset)
GH_RELEASE_TIMEOUT_SECONDS = 10 * 60.0
