"""Secret parameters, AES-GCM encryption and the encrypted secret store."""