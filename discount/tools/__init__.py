"""Small command-line text tools: cols, echo, rep, space2nl and branch."""