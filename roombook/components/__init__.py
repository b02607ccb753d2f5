# roombook: Atomic components
