"""Core de fleet-probe.

Aquí vive la lógica que no depende de HTTP ni de la CLI: modelos, config,
extracción de versiones, orden de la flota y orquestación del pipeline.
"""
